#!/usr/bin/env python
# -*- encoding: utf-8 -*-
import io
import re
import ast
import os
from setuptools import find_packages, setup

NAME = 'lenareader'
DESCRIPTION = 'Selective reader for LENA binary recordings'
URL = 'https://github.com/lenareader/lenareader'
EMAIL = 'lenareader@users.noreply.github.com'
AUTHOR = 'lenareader developers'
LICENSE = 'Apache'

INSTALL_REQUIRES = [
    'numpy', 'pyyaml', 'python-dateutil', 'click', 'tqdm', 'parmap',
    'coloredlogs', 'cerberus', 'setuptools'
]

EXTRAS_REQUIRE = {'test': ['pytest']}

here = os.path.abspath(os.path.dirname(__file__))

with io.open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = '\n' + f.read()

_version_re = re.compile(r'__version__\s+=\s+(.*)')

with open(os.path.join(here, 'src/lenareader/__init__.py'), 'rb') as f:
    VERSION = str(ast.literal_eval(_version_re.search(
        f.read().decode('utf-8')).group(1)))


setup(
    name=NAME,
    version=VERSION,
    license=LICENSE,
    description=DESCRIPTION,
    long_description=long_description,
    author=AUTHOR,
    author_email=EMAIL,
    url=URL,
    packages=find_packages('src'),
    package_dir={'': 'src'},
    package_data={'lenareader': ['assets/config/*.yaml',
                                 'assets/logger/*.yaml']},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.6',
    classifiers=[
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points={
        'console_scripts': ['lenareader=lenareader.command_line:cli'],
    },
    download_url='{url}/archive/{version}.tar.gz'.format(url=URL,
                                                         version=VERSION),
)
