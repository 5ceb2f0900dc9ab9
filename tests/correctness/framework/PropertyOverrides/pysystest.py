__pysys_title__   = r""" Properties - precedence of command line, environment, file and default values """
#                        ================================================================================

__pysys_purpose__ = r""" Checks that command line values override environment variables, which override values from 
	.properties files, which override the defaults.
	"""

__pysys_authors__ = "bsp"
__pysys_created__ = "2024-03-04"

import pysys
from pysys.constants import *
from buildinfotest.buildinfo_basetest import BuildInfoBaseTest

class PySysTest(BuildInfoBaseTest):
	def execute(self):
		env = {
			'BUILDINFO_PLATFORM_SECURITY_PATCH':'2024-02-05',
			'BUILDINFO_PLATFORM_BASE_OS':'env-os',
			'BUILDINFO_MY_LABEL':'env-label',
		}
		self.buildinfo(stdouterr='buildinfo', env=env, args=['PLATFORM_BASE_OS=cmdline-os'])
		self.buildinfo(stdouterr='properties', env=env, args=['PLATFORM_BASE_OS=cmdline-os', 'platform_preview_sdk_version=2', '--properties'])

	def validate(self):
		PROP_FILE = 'build-output/intermediates/buildinfo.prop/buildinfo.prop'
		self.assertGrep(PROP_FILE, expr=r'^ro.build.version.base_os=cmdline-os$')
		self.assertGrep(PROP_FILE, expr=r'^ro.build.version.security_patch=2024-02-05$')
		self.assertGrep(PROP_FILE, expr=r'^ro.build.version.min_supported_target_sdk=23$')
		self.assertGrep(PROP_FILE, expr=r'^ro.build.version.preview_sdk=$')

		self.assertGrep('buildinfo.out', expr=r'Overriding property value from environment: PLATFORM_SECURITY_PATCH=2024-02-05')

		# property names on the command line are case-insensitive
		self.assertGrep('properties.out', expr=r'PLATFORM_PREVIEW_SDK_VERSION = 2$')
		self.assertGrep('properties.out', expr=r'MY_LABEL = env-label$')
		self.assertGrep('properties.out', expr=r'PLATFORM_BASE_OS = cmdline-os$')
