"""
Pydantic schemas for API request and response validation.

Request models double as the validation rule sets: every FastAPI endpoint
takes a strict Pydantic model, so handlers never see unvalidated input.
"""
