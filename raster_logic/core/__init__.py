#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core functionality for raster logic operations.

This module contains the core components for raster data handling,
configuration management, error types and logging setup.
"""
