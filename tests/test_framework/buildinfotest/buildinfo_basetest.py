from pysys.constants import *
from pysys.basetest import BaseTest
from pysys.utils.filegrep import filegrep

class BuildInfoBaseTest(BaseTest):

	PRODUCT_PROPERTIES = [
		'PLATFORM_SDK_VERSION=34',
		'PLATFORM_VERSION_LAST_STABLE=14',
		'PLATFORM_SECURITY_PATCH=2024-01-01',
		'PLATFORM_MIN_SUPPORTED_TARGET_SDK_VERSION=23',
	]
	""" Command line values for the product properties that have no default. """

	def buildinfo(self, args=None, buildfile='test.buildinfo.py', shouldFail=False, stdouterr='buildinfo', env=None, setOutputDir=True, **kwargs):
		"""
		Runs buildinfo against the specified buildfile or test.buildinfo.py from the
		input dir. Produces output in the <testoutput>/build-output folder.

		@param buildfile: the build file to use, or None to run without one.

		@param shouldFail: by default, the test will abort if the build fails.
		Set this to True if the build is expected to fail in which case
		the test will abort if it succeeds, and this method will return a
		string identifying the overall failure message if not.

		@returns the failure message string if shouldFail=True, otherwise nothing

		The exit status of the process is stored in self.lastExitStatus.
		"""
		stdout,stderr=self.allocateUniqueStdOutErr(stdouterr)
		args = args or []
		try:
			try:
				overrides = {'PYTHONPATH': os.path.normpath(self.project.BUILDINFO_ROOT)}
				overrides.update(env or {})
				environs = self.createEnvirons(overrides, command=sys.executable)
				environs['COVERAGE_FILE'] = '.coverage.%s'%stdouterr # use unique names to avoid overwriting

				newargs = ['-m', 'buildinfo',
					'--logfile', os.path.join(self.output, stdout.replace('.out', '')+'.log'),
					]
				if buildfile: newargs += ['-f', os.path.join(self.input, buildfile)]
				if setOutputDir: newargs.append('OUTPUT_DIR=%s'%self.output+'/build-output')
				args = newargs+args
				if getattr(self, 'pythonCoverage', False):
					self.log.info('Enabling Python code coverage')
					args = ['-m', 'coverage', 'run', '--source=%s'%os.path.normpath(self.project.BUILDINFO_ROOT+'/buildinfo')]+args

				result = self.startProcess(sys.executable, args,
					environs=environs, workingDir=self.output,
					stdout=stdout, stderr=stderr, displayName=('buildinfo %s'%' '.join(args[2:])).strip(),
					abortOnError=True, ignoreExitStatus=shouldFail, **kwargs)
				self.lastExitStatus = result.exitStatus
				if shouldFail and result.exitStatus != 0: raise Exception('Build failed as expected')
			finally:
				self.logFileContents(stdout, tail=True) or self.logFileContents(stderr, tail=True)

		except AssertionError as e:
			self.log.exception('Assertion error: ')
			raise
		except Exception as e:
			m = None
			try:
				# this gives the best message
				m = filegrep(os.path.join(self.output, stdout), '(BUILDINFO FAILED: .*)', returnMatch=True)
				if m: m = m.group(1)
			except Exception as e2:
				if shouldFail: raise e2 # this is fatal if we need the error message
				self.log.exception('Error handling block failed: ')
			if not m: self.log.warning('Caught exception running build: %s', e)
			m = m or '<unknown failure>'

			if shouldFail:
				self.log.info('Build failed as expected; message is: %s', m)
				return m
			else:
				self.abort(BLOCKED, 'Build %s failed unexpectedly: %s'%(stdouterr, m))
		else:
			if shouldFail:
				self.abort(FAILED, 'build %s was expected to fail but succeeded'%stdouterr)

		return None
