"""pagewright - static HTML assembly for multi-bundle web applications.

A bundle page is built from the bundle's entry plus the localized HTML
templates of every bundle it requires. Each template is rendered into a
shared buffer, and the bundle layout wraps the result into one document.

- builder: fragment resolution, template dispatch and page building
- models: entries, the bundle interface and the project-backed bundle model
- helpers: functions callable from templates
"""

__version__ = "0.1.0"
__author__ = "pagewright Contributors"
