from physcalc.cli.main import main

main()
