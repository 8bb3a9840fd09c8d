"""
Test Suite for Receipt Ledger

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and CLI workflow tests

Test Data:
All budgets and receipts are synthetic. Nothing talks to the real YNAB API;
HTTP tests use httpx.MockTransport.
"""
