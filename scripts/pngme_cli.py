#!/usr/bin/env python3
'''
Hide messages inside PNG files.

 $ pngme_cli.py encode image.png RuSt 'this is a secret'
 $ pngme_cli.py decode image.png RuSt
 this is a secret
'''
import logging
import os
import sys

from pngme.commands import main


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
