"""Application-wide constants."""

PROJECT_NAME = "HACCP Journal"
API_V1_STR = "/api/v1"
