# Symmetric Cryptor Test Suite
"""
Test suite including:
- Unit tests (key derivation, authenticator, envelope format)
- Encrypt / decrypt tests
- Security tests (tampering, wrong password, malformed input)
- CLI tests

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""
