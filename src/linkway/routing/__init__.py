"""Routing — ordered route templates with first-match-wins resolution.

Templates are compiled once at registration and never change; incoming
URLs are sanitized the same way before they are matched.
"""
