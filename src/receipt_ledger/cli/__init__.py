"""
Command Line Interface Package

Command Structure:
- receipts: Main entry point with utility commands (version, config)
- receipts reconcile: Record a parsed receipt in YNAB
- receipts info: List the budget's accounts, categories and payees
"""
