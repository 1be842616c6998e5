from synthcheck.cli import main

main()
