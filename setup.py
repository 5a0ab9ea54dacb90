#!/usr/bin/env python

from setuptools import setup, find_packages
import os

from netparams import __version__

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.md')) as f:
    README = f.read()

requires = []

setup(name='python-netparams',
      version=__version__,
      description='Network parameter registry for Bitcoin-based networks.',
      long_description=README,
      long_description_content_type='text/markdown',
      classifiers=[
          "Programming Language :: Python",
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
      ],
      keywords='bitcoin',
      packages=find_packages(),
      python_requires='>=3.5',
      zip_safe=False,
      install_requires=requires,
      test_suite="netparams.tests"
     )
