"""Letterpress analyzer configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class AnalyzerConfig(BaseSettings):
    """Configuration settings for the Letterpress move analyzer."""

    board_rows: int = 5
    """Number of rows on the board. Default: 5."""

    board_cols: int = 5
    """Number of columns on the board. Default: 5."""

    win_threshold: int | None = None
    """Squares needed to win once the board is full.

    If None (default), a strict majority of the board.
    """

    max_results: int = 19
    """Maximum number of ranked moves to return. Default: 19."""

    word_list_path: str = "words.txt"
    """Dictionary file, one word per line, most common words first."""

    min_word_length: int = 2
    """Minimum word length kept when loading the word list. Default: 2."""

    use_parallel: bool = False
    """Whether to generate moves in a process pool. Default: False."""

    max_workers: int | None = None
    """Maximum number of worker processes to use. If None (default), uses os.cpu_count() - 1."""

    chunk_size: int = 500
    """Number of words handed to a worker process per task. Default: 500."""

    log_level: str = "WARNING"
    """Log level for the `letterpress` logger when run from the command line."""

    model_config = SettingsConfigDict(
        env_prefix="LETTERPRESS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
        frozen=True,
    )


config = AnalyzerConfig()
