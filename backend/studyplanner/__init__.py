"""Application package for the study planner backend.

This package exposes the database, model, schema and repository modules
used by the FastAPI application in `studyplanner.main`. Individual modules
contain the concrete implementations and documentation.
"""
