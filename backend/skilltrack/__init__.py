"""Application package for the Skilltrack-365 catalog site.

This package exposes the page components, service, repository and model
modules used by the FastAPI application. It is intentionally lightweight;
individual modules contain the concrete implementations and documentation.
"""
