from letterpress import main

main()
