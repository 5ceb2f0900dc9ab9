# buildinfo - build-time properties file generator
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
Contains `ProcessOutputHandler` which converts the output and return code of a child process (such as the
shell that runs a command action) into log statements and a `BuildException` on failure.
"""

import logging

from buildinfo.utils.buildexceptions import BuildException

_logger = logging.getLogger('processoutput')

class ProcessOutputHandler(object):
	"""
	A class for handling the stdout/stderr output lines and return code
	from a process, accumulating errors and warnings, and converting into
	appropriate log statements and a summary exception if it failed.

	Usage: the handleLine method will be invoked for every line in the stdout
	and stderr, then handleEnd will be called once, with the process returnCode
	if known. handleEnd raises a BuildException if the process is
	deemed to have failed.

	>>> h = ProcessOutputHandler('myhandler')
	>>> h.handleLine(u'error: My error')
	>>> h.handleLine(u'error: My error 2')

	>>> len(h.getErrors())
	2

	>>> h.handleEnd(5)
	Traceback (most recent call last):
	...
	buildinfo.utils.buildexceptions.BuildException: 2 errors, first is: error: My error

	>>> h = ProcessOutputHandler('myhandler')
	>>> h.handleLine(u'some output')
	>>> h.handleEnd(1)
	Traceback (most recent call last):
	...
	buildinfo.utils.buildexceptions.BuildException: myhandler failed with return code 1; no errors reported, last line was: some output

	>>> ProcessOutputHandler('myhandler').handleEnd(0)
	"""

	def __init__(self, name, treatStdErrAsErrors=True, **kwargs):
		"""
		@param name: a short display name for this process or module, used as a
			prefix for log lines.

		@param treatStdErrAsErrors: controls whether all content on stderr
			(rather than stdout) is treated as an error by default.

		@param options: a dictionary of resolved option values, available to implementations as
			`self.options`.
		"""
		self._name = name
		self._errors = []
		self._warnings = []
		self._lastLine = ''

		self._logger = _logger
		self.options = kwargs.pop('options', None) or {}
		self._treatStdErrAsErrors = treatStdErrAsErrors
		assert not kwargs, 'Unexpected keyword argument to ProcessOutputHandler: %s'%kwargs.keys()

	def handleLine(self, line: str, isstderr=False):
		"""
		Called once for every line in the stdout and stderr
		(stderr after stdout).

		@param isstderr: a hint to indicate the source of the line.
		"""
		self._lastLine = line

		level = self._decideLogLevel(line, isstderr)
		if not level: return

		if level == logging.ERROR:
			self._errors.append(line)
		elif level == logging.WARNING:
			self._warnings.append(line)
		self._logger.log(level, '%s> %s', self._name, line)

	def handleEnd(self, returnCode=None):
		"""
		Called when the process has terminated, and raises a ``BuildException`` if there were any errors or if
		``returnCode`` is non-zero. The exception message will contain the first error, or if none the first
		warning, or failing that, the last line of the output.
		"""
		if self._warnings: self._logger.warning('%d warnings during %s', len(self._warnings), self._name)

		if self._errors:
			msg = self._errors[0]
			if len(self._errors)>1:
				msg = '%d errors, first is: %s'%(len(self._errors), msg)
		elif returnCode:
			msg = '%s failed with return code %s'%(self._name, returnCode)
			if self._warnings:
				msg += '; no errors reported, first warning was: %s'%self._warnings[0]
			elif self._lastLine:
				msg += '; no errors reported, last line was: %s'%self._lastLine
			else:
				msg += ' and no output generated'
		else:
			return
		raise BuildException(msg)

	def _decideLogLevel(self, line: str, isstderr: bool) -> int:
		"""
		Returns the log level to use for this line, or None to ignore it.
		"""
		if not line.strip(): return None
		l = line.lower()
		if l.startswith('error') or (isstderr and self._treatStdErrAsErrors):
			return logging.ERROR
		if l.startswith('warning'):
			return logging.WARNING
		return logging.INFO

	def getErrors(self): return self._errors
	def getWarnings(self): return self._warnings
