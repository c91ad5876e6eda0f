from setuptools import setup, find_packages
import re

# Read version from swecalc/__init__.py
with open('swecalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='swecalc',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'swecalc': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.5',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'swe-calc=swecalc.cli.__main__:main',
            'swe-calc-mcp=swecalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Swedish salary, dividend (3:12) and company-car calculators.',
    python_requires='>=3.10',
)
