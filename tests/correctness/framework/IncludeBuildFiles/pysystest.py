__pysys_title__   = r""" Build files - including other build files """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that include() loads another build file (with ${...} expansion of its name), and 
	that relative paths in the included file are resolved against its own directory.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo()
		self.buildinfo(stdouterr='properties', args=['--properties'])

	def validate(self):
		PROP_FILE = 'build-output/intermediates/buildinfo.prop/buildinfo.prop'
		self.assertGrep(PROP_FILE, expr=r'^ro.build.version.sdk=33$')
		self.assertGrep(PROP_FILE, expr=r'^ro.build.version.release_or_codename=13$')
		self.assertGrep('properties.out', expr=r'PRODUCT_CONFIG_DIR = %s$'%re.escape(os.path.join(self.input, 'product')))
