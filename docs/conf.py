# Sphinx configuration for the drive-redirector API docs.

import os
import sys

sys.path.insert(0, os.path.abspath('../src'))

from drive_redirector import __version__  # noqa: E402

project = 'Drive Redirector'
author = 'Drive Redirector contributors'
copyright = '2026, ' + author
release = __version__
version = '.'.join(__version__.split('.')[:2])

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

root_doc = 'index'
exclude_patterns = ['_build']

html_theme = 'sphinx_rtd_theme'

# Only the entrypoint imports uvicorn; docs builds do not need it installed.
autodoc_mock_imports = ['uvicorn']
autodoc_member_order = 'bysource'
autodoc_default_options = {
    'members': True,
    'show-inheritance': True,
}
typehints_fully_qualified = False
always_document_param_types = True

napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
