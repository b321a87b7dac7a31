from glob import glob
from setuptools import setup


setup(
    name='stackcalc',
    version='0.1.0',
    description='Postfix stack machine calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['stackcalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'mypy',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
