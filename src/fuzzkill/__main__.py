from fuzzkill.cli import main

main()
