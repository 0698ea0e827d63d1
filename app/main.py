"""
Accounting Copilot launcher

Run with:
    python app/main.py --entries-file entries.txt
"""

from accounting_copilot.cli import main


if __name__ == "__main__":
    main()
