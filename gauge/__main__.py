from gauge.cli import main

main()
