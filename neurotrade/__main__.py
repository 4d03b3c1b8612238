from neurotrade.cli import main

main()
