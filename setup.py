from setuptools import setup, find_packages

setup(
    name='pdindex',
    version='1.0.0',
    author='PDIndex Contributors',
    description='PDIndex: Portfolio Diversification Index via principal components analysis',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests*', 'scripts*']),
    install_requires=open('requirements.txt').read().splitlines(),
    extras_require={
        'test': ['pytest>=7.0'],
    },
    classifiers=[
        'Programming Language :: Python :: 3.10',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
)
