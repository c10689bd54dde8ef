import setuptools
from os.path import join, dirname

def get_file_contents(filename):
    package_directory = dirname(__file__)
    with open(join(package_directory, filename), 'r', encoding='utf-8') as file:
        contents = file.read()
    return contents

long_description = """Configuration layer for a Nextflow pipeline annotating viral consensus
sequences with VADR and table2asn: parameters, execution profiles, and resource ceilings.
"""
version = get_file_contents(join('viralannotationtoolbox', 'version.txt')).strip()

setuptools.setup(
    name='viralannotationtoolbox',
    version=version,
    description='Configuration and resource governance for a viral consensus annotation pipeline.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=[
        'viralannotationtoolbox',
        'viralannotationtoolbox.entry_point',
        'viralannotationtoolbox.standalone_utilities',
        'viralannotationtoolbox.workflow',
        'viralannotationtoolbox.workflow.common',
        'viralannotationtoolbox.workflow.scripts',
        'viralannotationtoolbox.workflow.templates',
    ],
    classifiers=[
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Intended Audience :: Science/Research',
    ],
    package_data={
        'viralannotationtoolbox': [
            'version.txt',
        ],
        'viralannotationtoolbox.workflow.templates': [
            'nextflow.config.jinja',
        ],
    },
    python_requires='>=3.10',
    entry_points={
        'console_scripts' : [
            'vat = viralannotationtoolbox.entry_point.cli:main_program',
        ]
    },
    install_requires=[
        'Jinja2>=3.0.1',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
