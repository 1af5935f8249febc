"""
api
===

FastAPI application exposing the LegalOps health score.
"""
