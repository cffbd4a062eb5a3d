# Middleware package init
"""
Todo API - Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Reporting] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    1. Request ID: assign the correlation ID everything else uses
    2. Reporting: hand every request to the error reporter, rejected ones included
    3. Rate Limit (opt-in, RATE_LIMIT_ENABLED): reject abusive clients before routing
    4. Logging: time the request and write the access log line
"""
