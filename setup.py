from setuptools import setup

setup(
    name='topoguide',
    version='0',
    packages=['topoguide', 'topoguide.checks'],
    install_requires=['PyYAML', 'pydantic>=2'],
    extras_require={
        'tests': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'topoguide=topoguide.cli:main',
        ],
    },
    python_requires='>=3.8',
    url='https://github.com/topoguide/topoguide/',
    license='',
    author='topoguide team',
    author_email='',
    description='Platform-independent path helpers and a coding conventions checker for Sheet-based simulator code.'
)
