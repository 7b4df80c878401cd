"""
Test Suite for Library API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_authors.py / test_books.py: HTTP tests for /api/authors and /api/books
- test_repositories.py: Repository layer against SQLite
- test_services.py: Service layer with mocked repositories
- test_validation.py: Validation messages and the error mapping table
- test_middleware.py: Request deadline and disconnect handling
- test_config.py / test_logging.py: Settings and logging setup
- test_health.py: Health check, root endpoint, framework errors

Running Tests:
    # Install test dependencies
    pip install -e ".[test]"

    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
