from setuptools import setup


setup(name='coinuri',
      version='0.1.0dev',
      description='Payment request URI (BIP21 style) parsing and building for multi-currency wallets',
      url='',
      author='',
      author_email='',
      license='GPL',
      packages=['coinuri'],
      python_requires='>=3.7',
      install_requires=['python-bitcointx>=1.1.3', 'chromalog==1.0.5',
                        'colorama'],
      extras_require={'test': ['pytest']},
      zip_safe=False)
