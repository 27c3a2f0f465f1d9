# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Remote version catalog retrieval."""

from __future__ import annotations

from .fetcher import fetch_and_cache

__all__ = ["fetch_and_cache"]
