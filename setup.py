#!/usr/bin/env python3
from setuptools import setup, find_packages
import os

here = os.path.abspath(os.path.dirname(__file__))

# Get the long description from the README file
with open(os.path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='zipit',
    version='0.4.0',

    description='Create and stream zip archives on the fly',
    long_description=long_description,
    long_description_content_type='text/markdown',

    license='MIT',

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        'Intended Audience :: Developers',
        'Topic :: System :: Archiving :: Packaging',
        'Framework :: AsyncIO',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
    ],

    keywords='zip streaming async archive',

    python_requires='>=3.10',
    install_requires=['aiofiles'],
    extras_require={
        'test': ['pytest', 'pytest-asyncio'],
    },

    packages=find_packages(exclude=['examples', 'tests']),
)
