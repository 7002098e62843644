"""Patient records application.

This package contains the models, access rules, forms, views and
management commands of the hospital patient records site.
"""
