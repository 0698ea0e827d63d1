from accounting_copilot.cli import main

main()
