"""
Command-line interface modules.

Provides CLI entry points for:
- api_server: Start the REST API
- init_db: Create the database schema and load seed listings
"""
