"""Crowd group directory client package.

To use Crowd services:
    from app.core.crowd import CrowdClient, GroupService

To build a client from the environment:
    from app.config import load_settings
    client = CrowdClient.from_settings(load_settings())
"""
