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

import subprocess, os, locale
import threading

from buildinfo.utils.outputhandler import ProcessOutputHandler
from buildinfo.utils.buildexceptions import BuildException

import logging
log = logging.getLogger('process')

def _wait_with_timeout(process, displayName, timeout):
	"""
	PRIVATE method - do not call

	Returns (stdout, stderr, timedout); stdout/stderr are byte buffers.
	"""
	timedOut = [False]

	def kill_proc(): # executed on a background thread
		log.info('Process timeout handler for %s invoked after %s s; still running=%s', displayName, timeout, process.poll()==None)
		if process.poll()!=None: return # has terminated already
		timedOut[0] = True
		try:
			process.kill()
		except Exception as e:
			if process.poll() == None:
				log.error('Failed to kill process %s (pid %s) after %d second timeout: %s', displayName, process.pid, timeout, e)

	timer = threading.Timer(timeout, kill_proc, [])
	timer.start()
	try:
		stdout, stderr = process.communicate()
	finally:
		timer.cancel()

	return stdout, stderr, timedOut[0]

def call(args, env=None, cwd=None, outputHandler=None, outputEncoding=None, timeout=None, displayName=None, options=None):
	"""
	Call a process with the specified args, logging stderr and stdout to the specified
	output handler which will throw an exception if the exit code or output
	of the process indicates an error.

	@param args: The command and arguments to invoke (a list, the first element of which is the executable).
		None items in this list will be ignored.

	@param outputHandler: a ProcessOutputHandler instance. If not specified, a default is created.

	@param env: Override the environment the process is started in (defaults to the parent environment)

	@param cwd: Change the working directory the process is started in (defaults to the parent cwd)

	@param outputEncoding: name of the character encoding the process generates; defaults to the
		preferred encoding of this machine.

	@param timeout: maximum time a process is allowed to run. Defaults to the ``process.timeout`` option.

	@param displayName: human-friendly description of the process for use in error messages

	@param options: where possible, always pass in a dictionary of resolved options.
	"""
	if options is None: options = {}
	if not timeout: timeout = options.get('process.timeout', 600)

	args = [x for x in args if x != None]
	processName = os.path.basename(args[0])

	environs = os.environ.copy()
	if env:
		for k in env:
			if None == env[k]:
				environs.pop(k, None)
			else:
				environs[k] = env[k]
	if not cwd: cwd = os.getcwd()

	log.info('Executing %s process: %s', processName, ' '.join(['"%s"'%s if ' ' in s else s for s in args]))
	if cwd != os.getcwd():
		log.info('%s working directory: %s', processName, cwd)
	try:
		process = subprocess.Popen(args, env=environs, stdout=subprocess.PIPE, stderr=subprocess.PIPE, cwd=cwd)
	except Exception as e:
		raise EnvironmentError('Cannot start process "%s": %s'%(args[0], e))

	if not outputHandler:
		outputHandler = ProcessOutputHandler(processName, options=options)

	if not displayName:
		displayName = str(args)
		if len(displayName)>200: displayName=displayName[:200]+'...]'
	(out, err, timedout) = _wait_with_timeout(process, displayName, timeout)

	if outputEncoding is None:
		outputEncoding = locale.getpreferredencoding()

	# be tolerant about unexpected chars, given how hard it is to predict what subprocesses will write
	out = str(out, outputEncoding, errors='replace')
	err = str(err, outputEncoding, errors='replace')

	hasfailed = True
	try:
		for l in out.splitlines():
			outputHandler.handleLine(l, False)
		for l in err.splitlines():
			outputHandler.handleLine(l, True)

		if timedout: # only throw after we've written the stdout/err
			raise BuildException('Terminating process %s after hitting %d second timeout' % (processName, timeout))

		outputHandler.handleEnd(process.returncode) # will throw on error
		hasfailed = False
		return outputHandler
	finally:
		if hasfailed:
			log.debug('Arguments of failed process are: %s' % '\n   '.join(['"%s"'%s if ' ' in s else s for s in args]))
