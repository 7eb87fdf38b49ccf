"""Core Business Logic Module

Module Structure:
    - crowd/ : Crowd REST API client (groups, memberships, search)

Import explicitly when needed:
    from app.core.crowd import CrowdClient, GroupService
"""
