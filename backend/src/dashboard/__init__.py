"""Dashboard - browser view listing consultations as cards"""
