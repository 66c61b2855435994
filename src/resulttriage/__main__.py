from resulttriage.cli import main

main()
