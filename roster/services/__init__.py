"""
High-level use cases for the roster API.

Service modules validate input and orchestrate a repository; routers (FastAPI
endpoints) call these services instead of reading the JSON document directly.
"""
