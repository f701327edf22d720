"""
Core
- Path model, responses and the database's value ordering
- Error taxonomy shared by every layer
- Interfaces for credentials, transactions and metrics
"""
