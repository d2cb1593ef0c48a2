# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Callflow Editor API

HTTP façade over the document database behind the call-flow editing
tool. Serves call-flow scripts, message groups, tag lists and category
menu links across environments and virtual assistant tenants.

Quick Start:
    callflow-api serve --port 5678

Architecture:

    Router (gateway)
      -> Repositories (intent policy, CRUD)
        -> DocumentStore (Cosmos DB | memory)
             ^ selected per environment/tenant by ProfileResolver
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
