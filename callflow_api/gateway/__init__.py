# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Gateway Module

FastAPI application, routes, request context and error mapping.

Usage:
    uvicorn --factory callflow_api.gateway.app:create_app
"""
