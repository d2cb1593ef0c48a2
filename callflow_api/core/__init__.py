# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Core Module

Service-wide building blocks:
- Settings: pydantic-settings configuration
- Profiles: environment/tenant connection profile resolution
- Async base: lifecycle hooks and settled fan-out
"""
