from setuptools import setup

exec(open('vsphere_helper/version.py').read())

setup(
    name='vsphere_helper',
    version=__version__,  # noqa: F821
    packages=['vsphere_helper'],
    package_dir={'vsphere_helper': 'vsphere_helper'},
    package_data={'vsphere_helper': ['config/config.yml.example']},
    scripts=['bin/vsphere-helper'],
    description='vCenter inventory, clone, status and power command line '
                'tool',
    long_description=open('README.txt').read(),
    python_requires='>=3.7',
    install_requires=[
        "netaddr>=0.7.19",
        "pyvmomi>=7.0",
        "PyYAML>=5.1",
    ],
    extras_require={
        'test': ['pytest'],
    },
)
