__pysys_title__   = r""" BuildInfoProp - output files query by tag """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that the default (empty) tag reports exactly the generated file without running the 
	build, and that any other tag is rejected as unsupported.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo(stdouterr='default-tag', args=self.PRODUCT_PROPERTIES+['--output-files='])
		msg = self.buildinfo(stdouterr='foo-tag', args=self.PRODUCT_PROPERTIES+['--output-files', 'foo'], shouldFail=True)
		self.assertThat('"unsupported tag" in msg', msg=msg)
		self.assertThat('exitStatus == 5', exitStatus=self.lastExitStatus)

	def validate(self):
		self.assertLineCount('default-tag.out', expr=r'.', condition='==1')
		self.assertGrep('default-tag.out', expr=r'intermediates.buildinfo.prop.buildinfo.prop$')
		self.assertGrep('foo-tag.out', expr=r'unsupported tag "foo"')

		# the query must not run the build
		self.assertPathExists('build-output/intermediates/buildinfo.prop/buildinfo.prop', exists=False)
