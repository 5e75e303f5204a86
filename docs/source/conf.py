import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

project = 'dblp-search'
copyright = '2026, dblp-search contributors'
author = 'dblp-search contributors'
release = '0.3.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]

templates_path = ['_templates']
exclude_patterns = []

html_theme = 'sphinx_rtd_theme'
html_static_path = ['_static']
