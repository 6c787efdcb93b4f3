"""
Amrutam Doctor Portal: backend for an Ayurvedic telehealth platform

A clean architecture-based service exposing the doctor directory,
appointment and consultation scheduling, support inquiries and
simulated payments over MongoDB.
"""

__version__ = "1.0.0"
__author__ = "Amrutam Team"
__description__ = "Ayurvedic doctor portal backend"
