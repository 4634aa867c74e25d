"""Geofenced attendance kiosk backend.

Organized by feature modules (locations, staff, face, attendance) with a thin
Flask controller layer over service and repository layers.
"""
