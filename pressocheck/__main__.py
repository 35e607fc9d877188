from pressocheck.console import main

main()
