# coding=UTF-8
#------------------------------------------------------------------------------
# Copyright (c) Acoular Development Team.
#------------------------------------------------------------------------------

from setuptools import setup
from os.path import join, abspath, dirname

sf_version = "26.10"
sf_author = "Acoular Development Team"


# Get the long description from the relevant file
here = abspath(dirname(__file__))
with open(join(here, 'README.rst')) as f:
    long_description = f.read()


install_requires = list([
      'numpy>=1.22',
      'setuptools',
      'numba>=0.56',
      'scipy>=1.8',
      'tables>=3.7',
      'traits>=6.0',
	])

tests_require = list([
      'pytest<9',
      'pytest-cases',
	])

setup(name="sfsynth",
      version=sf_version,
      description="Library for monochromatic sound field synthesis",
      long_description=long_description,
      license="BSD",
      author=sf_author,
      author_email="info@acoular.org",
      url="http://www.acoular.org",
      classifiers=[
      'Development Status :: 4 - Beta',
      'Intended Audience :: Education',
      'Intended Audience :: Science/Research',
      'Topic :: Scientific/Engineering :: Physics',
      'License :: OSI Approved :: BSD License',
      'Programming Language :: Python :: 3.10',
      'Programming Language :: Python :: 3.11',
      'Programming Language :: Python :: 3.12',
      ],
      keywords='sound field synthesis wave field synthesis loudspeaker array',
      packages = ['sfsynth'],

      install_requires = install_requires,

      extras_require = {'tests': tests_require},

      #to solve numba compiler
      zip_safe=False
)
