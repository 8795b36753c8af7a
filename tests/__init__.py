"""
Cash Hub Test Suite

- test_kv_store.py: Key-value backends (memory and MySQL)
- test_storage_service.py: Collections, seeding, auth and session slot
- test_analytics.py: Chart aggregation
- test_gemini_service.py: AI client structured outputs and fallbacks
- test_auth.py: Signup, login, recovery and logout routes
- test_transactions.py: Manual and AI transaction entry
- test_gamification.py: Goals and challenges
- test_split.py / test_charts.py / test_chat.py / test_settings.py: Remaining views
- test_security.py: CSRF, headers, access control and validation

Run all tests:
    pytest tests/

Run with verbose output:
    pytest tests/ -v
"""
