from setuptools import setup, find_packages

setup(
    name='flow-command-interpreter',
    version='1.0.0',
    description='Natural-language command interpreter for flow diagrams',
    packages=find_packages(include=['flow_api', 'flow_api.*', 'flow_core', 'flow_core.*']),
    install_requires=[
        'httpx>=0.24',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-asyncio>=0.21',
        ],
    },
    python_requires='>=3.8',
)
