from crateforge.cli import main

main()
