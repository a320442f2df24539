"""
Infrastructure shared by the API.

- database: Motor client and Beanie registration
- utils: response envelopes and HTTP exceptions
"""
