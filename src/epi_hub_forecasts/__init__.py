from .__about__ import *
