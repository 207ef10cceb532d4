from uno_groups.cli.main import main

main()
