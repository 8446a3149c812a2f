from repoget.cli import main

main()
