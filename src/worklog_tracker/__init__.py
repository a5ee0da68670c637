"""Worklog Tracker package.

Organized by feature modules (users, access, worklogs, reports) with a thin
Flask controller layer over service/repository layers.
"""
