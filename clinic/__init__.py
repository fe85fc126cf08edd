"""Clinic application for the hospital operations dashboard.

This package contains the models, serializers, services, views and route
registrations behind the dashboard's JSON API.
"""
