"""
Models for HACCP Journal.

- domain: enums describing the business vocabulary
- io: request and response schemas of the REST API
"""
