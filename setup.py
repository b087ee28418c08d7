from glob import glob
from setuptools import setup


setup(
    name='keycalc',
    version='0.1.0',
    description='Keypad calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    author='Alex Pilon',
    author_email='alp@alexpilon.ca',
    packages=['keycalc'],
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
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
