"""
Setup script for Throughput Monitor.

Usage:
    pip install .
    pip install -e ".[test]"

Installs the `throughput-monitor` command, which serves the chart page
and the live WebSocket stream on port 8080.
"""
from setuptools import setup

setup(
    name='throughput-monitor',
    version='1.0.0',
    description='Streams live network interface throughput to a browser chart over WebSocket',
    python_requires='>=3.9',
    packages=[
        'monitor',
        'storage',
        'service',
        'config',
    ],
    py_modules=['throughput_monitor'],
    install_requires=[
        'psutil>=5.9',
        'websockets>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'throughput-monitor=throughput_monitor:main',
        ],
    },
)
