#!/usr/bin/env python

from setuptools import find_packages, setup


# This installs the 'nopenaltycalc' Django app. The 'nopenaltysite' project
# is only needed to run the app (and its tests) standalone.

setup(name="nopenaltycalc",
      version="2025.1",
      description="No-penalty final grade calculation for grade categories",
      long_description=open("README.rst", "rt").read(),

      license="MIT",
      packages=find_packages(exclude=["tests", "tests.*"]),
      python_requires=">=3.10",
      install_requires=[
          "django>=4.2",
          ],
      extras_require={
          "test": [
              "pytest",
              "pytest-django",
              "factory-boy",
              ],
          },
      )
