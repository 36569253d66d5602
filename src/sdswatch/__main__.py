from sdswatch.cli import main

main()
