"""Wage Tracker package.

Organized by feature modules (users, wages, sessions, earnings) with a thin
Flask controller layer over service/repository layers.
"""
