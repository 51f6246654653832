"""
EventHub - event planning marketplace backend.

This package provides:
- Vendor profiles with service catalogs and reviews
- Events, bookings, chats and notifications
- AI-assisted vendor, budget, pricing and social media recommendations
- Role management driven by vendor profile lifecycle events
"""

__version__ = '1.0.0'
__author__ = 'EventHub Team'
