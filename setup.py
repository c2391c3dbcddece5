from setuptools import setup, find_packages
from setuptools_scm import get_version

def version():
    version = get_version(fallback_version='0.1')
    with open('src/famidisk/__init__.py', 'w') as f:
        f.write('__version__ = \'%s\'\n' % version)
    return version

setup(name = 'famidisk',
      python_requires = '>=3.8',
      version = version(),
      install_requires = [
          'crcmod'
      ],
      extras_require = {
          'test': ['pytest']
      },
      packages = find_packages('src'),
      package_dir = { '': 'src' },
      entry_points= {
          'console_scripts': ['famidisk=famidisk.cli:main']
      }
)
