"""TUI applications package.

Available applications:
- docker: Dashboard for containers, images, volumes and networks
"""
