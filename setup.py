import os
from setuptools import setup, find_packages

version = '0.1'

if os.path.exists("README.rst"):
    long_description = open("README.rst").read()
else:
    long_description = "A tiny structural validator for decoded JSON."

setup(name='tinyschema',
      version=version,
      description="Validate decoded JSON against compact schemas written in the same shape as the data.",
      long_description=long_description,
      keywords='json schema validation',
      author='',
      author_email='',
      url='',
      license='BSD',
      packages=find_packages(exclude=['examples', 'tests']),
      include_package_data=True,
      zip_safe=False,
      python_requires='>=3.6',
      install_requires=[
          # -*- Extra requirements: -*-
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points="""
      # -*- Entry points: -*-
      [console_scripts]
      tinyschema = tinyschema.__main__:main
      """,
      classifiers=[
          'Development Status :: 4 - Beta',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: BSD License',
          'Operating System :: OS Independent',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: CPython',
          'Topic :: Software Development :: Libraries :: Python Modules'
      ]
      )
