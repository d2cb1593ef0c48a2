# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Data Module

- store: DocumentStore interface
- cosmos: Azure Cosmos DB backend
- memory: in-process backend
- connections: process-wide stores and the per-profile registry
- repositories: collection repositories and the callflow intent policy
"""
