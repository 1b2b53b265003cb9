# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Configuration for installing the dlp-risk-analysis package."""

from setuptools import find_packages
from setuptools import setup

setup(
    name='dlp-risk-analysis',
    version='0.0.1',
    packages=find_packages(exclude=['tests']),
    install_requires=[
        'google-api-core >=2.11',
        'google-cloud-bigquery >=3.6',
        'google-cloud-dlp >=3.12',
        'google-cloud-pubsub >=2.18',
        'googleapis-common-protos >=1.56',
    ],
    extras_require={
        'test': ['pytest >=7'],
    },
    url='N/A',
    author='N/A',
    author_email='N/A',
)
