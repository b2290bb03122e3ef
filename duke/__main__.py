from duke.cli.app import main

main()
