# -*- coding: utf-8 -*-
"""Data source registry test suite."""
