"""Consultations - creation handler and read model for the dashboard"""
