# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the API:
# - test_exceptions.py: ApiError envelope and fixed auth messages
# - test_tokens.py: Token issuing, verification and resolution
# - test_pipeline.py: CORS gate and error interceptor
# - test_auth_routes.py: /get_token and the secret_data endpoints
# - test_config.py: Settings loading and validation
# - test_health.py: Diagnostic endpoints
#
# Run tests with: pytest
# =============================================================================
