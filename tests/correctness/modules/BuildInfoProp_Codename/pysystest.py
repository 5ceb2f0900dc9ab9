__pysys_title__   = r""" BuildInfoProp - preview codename builds """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that for a non-REL codename the release_or_codename property is the codename, that 
	active codenames are comma-joined, and that an explicit PLATFORM_VERSION takes precedence over the derived value.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		self.buildinfo(stdouterr='buildinfo', args=['TARGET_BUILD_VARIANT=eng'])
		self.buildinfo(stdouterr='buildinfo-explicit-version', args=['PLATFORM_VERSION=15', '--print'])

	def validate(self):
		self.assertDiff('build-output/intermediates/buildinfo.prop/buildinfo.prop', 'buildinfo.prop')
		self.assertGrep('buildinfo-explicit-version.out', expr=r'^ro.build.version.release_or_codename=15$')
		self.assertGrep('buildinfo-explicit-version.out', expr=r'^ro.build.version.release=14$')
		self.assertGrep('buildinfo-explicit-version.out', expr=r'^ro.build.type=user$')
