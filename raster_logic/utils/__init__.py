#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility modules for the raster logic tools.
"""
