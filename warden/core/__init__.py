"""Core building blocks shared by every layer.

- config: Settings (pydantic-settings)
- result: Success / Failure / Result
- errors: DomainError hierarchy
- enums: ErrorCode, Environment
- clock: UTC clock helpers
- container: composition root
"""
