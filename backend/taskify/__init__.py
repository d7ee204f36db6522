"""Taskify: multi-tenant project and task tracker API."""
