# -*- coding: utf-8 -*-

__title__ = "linelog"
__description__ = "Embeddable line-buffered logger with rotating log files"
__url__ = ""
__version__ = "0.1.0"
__author__ = "linelog contributors"
__author_email__ = ""
__license__ = "MIT"
