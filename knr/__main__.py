from knr.cli.app import main

main()
