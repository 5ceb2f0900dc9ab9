#
# buildinfo - build-time properties file generator
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
# Copyright (c) 2013 - 2019 Ben Spiller and Matthew Johnson
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
#
# Key concepts:
#   - properties - immutable values specified by build files, properties files
#       or overridden on the command line. May be a path, string, int, list
#       or True/False. Can be evaluated using "${propertyName}". All
#       properties must be defined before they can be used.
#   - module - something that registers build actions producing output
#       files, and optionally installs them into the image.
#

import sys, os, getopt, time, logging, threading, locale
from functools import reduce

from buildinfo.buildcommon import *
from buildinfo.buildcontext import BuildInitializationContext
from buildinfo.utils.fileutils import mkdir
from buildinfo.utils.buildexceptions import BuildException
from buildinfo.utils.consoleformatter import _registeredConsoleFormatters, getConsoleFormatter

log = logging.getLogger('buildinfo')

_TASK_BUILD = 'build'
_TASK_CLEAN = 'clean'
_TASK_LIST_PROPERTIES = 'listProperties'
_TASK_LIST_OPTIONS = 'listOptions'
_TASK_OUTPUT_FILES = 'outputFiles'
_TASK_PRINT = 'print'

ENVIRONMENT_PROPERTY_PREFIX = 'BUILDINFO_'

def main(args):
	""" Command line argument parser.
	"""

	try:
		usage = [
'',
'buildinfo build-time properties file generator %s on Python %s.%s.%s'% (BUILDINFO_VERSION, sys.version_info[0], sys.version_info[1], sys.version_info[2]),
'',
'buildinfo [operation]? [options]* [PROPERTY=value]*',
'',
'Special properties:',
'  OUTPUT_DIR=out             The main directory output will be written to',
'  TARGET_BUILD_VARIANT=user  Build variant: user, userdebug or eng',
'  KATI_ENABLED=true          Set to false to write a placeholder file',
'',
'Properties can also be set with %sPROPERTY environment variables.'%ENVIRONMENT_PROPERTY_PREFIX,
'',
'Operations: ',
'  (if none is specified, the default operation is a normal build)',
'      --clean                Delete the outputs of this build',
'      --properties           List properties and their values',
'      --options              List module options and their global values',
'      --output-files TAG     Print the output files for TAG of each module; ',
'                             use --output-files= for the default tag',
'      --print                Print the generated file contents',
'',
'Options:',
'   -f --buildfile <file>     Specify the root build file to load ',
'                             (default is ./root.buildinfo.py if it exists)',
'   -n --dry-run              Don\'t actually build anything, just print',
'                             what would be done',
'   -l --log-level LEVEL      Set the log level to debug/info/warning/critical',
'   -L --logfile <file>       Set the log file location (default ${LOG_FILE})',
'   -F --format               Message output format.',
'                             Options:',
] + [
'                                - '+ h for h in _registeredConsoleFormatters
]
		if reduce(max, list(map(len, usage))) > 80:
			raise Exception('Invalid usage string - all lines must be less than 80 characters')

		# set up defaults
		properties = {}
		buildOptions = { "dry-run":False }
		task = _TASK_BUILD
		buildFile = None
		logLevel = None
		logFile = None
		outputFilesTag = None
		format = "default"

		opts,extra = getopt.gnu_getopt(args, "nh?l:L:f:F:",
			["help","log-level=","logfile=","buildfile=", "dry-run",
			"properties", "options", "clean", "output-files=", "print", "format="])

		for o, a in opts: # option arguments
			o = o.strip('-')
			if o in ["?", "h", "help"]:
				print('\n'.join(usage))
				return 0
			elif o in ["f", "buildfile"]:
				buildFile = os.path.abspath(a)
			elif o in ['properties']:
				task = _TASK_LIST_PROPERTIES
			elif o in ['options']:
				task = _TASK_LIST_OPTIONS
			elif o in ['output-files']:
				task = _TASK_OUTPUT_FILES
				outputFilesTag = a
			elif o in ['print']:
				task = _TASK_PRINT
			elif o in ['clean']:
				task = _TASK_CLEAN
			elif o in ['l', 'log-level']:
				logLevel = getattr(logging, a.upper(), None)
				if not isinstance(logLevel, int):
					print('invalid log level "%s"'%a)
					return 2
			elif o in ['L', 'logfile']:
				logFile = a
			elif o in ['F', 'format']:
				if not getConsoleFormatter(a):
					print('invalid format "%s"; valid formatters are: %s'%(a, ', '.join(_registeredConsoleFormatters.keys())))
					print('\n'.join(usage))
					return 2
				format = a
			elif o in ['n', 'dry-run']:
				buildOptions['dry-run'] = True
			else:
				assert False, "unhandled option: '%s'" % o

		for o in extra: # non-option arguments (i.e. no -- prefix)
			arg = o.strip()
			if not arg: continue
			if '=' not in arg:
				raise getopt.GetoptError('Unexpected argument "%s"; properties must be specified as PROPERTY=value'%arg)
			properties[arg.split('=', 1)[0].upper()] = arg.split('=', 1)[1]

	except getopt.error as msg:
		print(msg)
		print("For help use --help")
		return 2

	if buildFile is None and os.path.isfile('root.buildinfo.py'):
		buildFile = os.path.abspath('root.buildinfo.py')

	threading.current_thread().name = 'main'
	logging.getLogger().setLevel(logLevel or logging.INFO)

	# initialize logging to stdout - minimal output to avoid clutter
	hdlr = getConsoleFormatter(format)(sys.stdout, buildOptions)
	hdlr.setLevel(logLevel or logging.WARNING)
	logging.getLogger().addHandler(hdlr)

	stdout = sys.stdout

	try:
		init = BuildInitializationContext(properties)
		init.enableEnvironmentPropertyOverrides(ENVIRONMENT_PROPERTY_PREFIX)
		init.initializeFromBuildFile(buildFile)

		# nb: don't import anything that might define options until the build file is loaded
		from buildinfo.internal.executor import BuildExecutor

		if task == _TASK_LIST_PROPERTIES:
			p = init.getProperties()
			print("Properties: ", file=stdout)
			pad = max(list(map(len, p.keys())))
			if pad > 45: pad = 0
			for k in sorted(p.keys()):
				print(('%'+str(pad)+'s = %s') % (k, p[k]), file=stdout)

		elif task == _TASK_LIST_OPTIONS:
			options = init.mergeOptions(None)
			pad = max(list(map(len, options.keys())))
			if pad > 30: pad = 0
			for k in sorted(options.keys()):
				print(("%"+str(pad)+"s = %s") % (k, options[k]), file=stdout)

		elif task == _TASK_OUTPUT_FILES:
			executor = BuildExecutor(init, dryRun=True)
			for (m, ctx) in executor.generate():
				for f in m.outputFiles(outputFilesTag):
					# must be easy to copy+paste, so don't put anything else on the line
					print(f, file=stdout)

		elif task == _TASK_PRINT:
			context = init.createBuildContext()
			for m in init.modules():
				text = m.preview(context)
				if text is not None: stdout.write(text)
			stdout.flush()

		elif task in [_TASK_BUILD, _TASK_CLEAN]:
			if not logFile:
				logFile = _maybeCustomizeLogFilename(init.getPropertyValue('LOG_FILE'), task==_TASK_CLEAN)
			logFile = os.path.abspath(logFile)

			logdir = os.path.dirname(logFile)
			if logdir and not os.path.exists(logdir): mkdir(logdir)
			log.critical('Writing build log to: %s', logFile)

			fileHandler = logging.FileHandler(logFile, mode='w', encoding='UTF-8')
			fileHandler.setFormatter(logging.Formatter('%(asctime)s %(relativeCreated)05d %(levelname)-8s [%(threadName)s %(thread)5d] %(name)-10s - %(message)s', None))
			fileHandler.setLevel(logLevel or logging.INFO)
			logging.getLogger().addHandler(fileHandler)
			try:
				log.info('Using buildinfo %s from %s on Python %s.%s.%s', BUILDINFO_VERSION, os.path.normpath(os.path.dirname(os.path.dirname(__file__))), sys.version_info[0], sys.version_info[1], sys.version_info[2])
				log.info('Using build options: %s', buildOptions)
				log.info('Default encoding for subprocesses assumed to be: %s', locale.getpreferredencoding())

				DATE_TIME_FORMAT = "%a %Y-%m-%d %H:%M:%S %Z"
				startTime = time.time()
				executor = BuildExecutor(init, dryRun=buildOptions['dry-run'])

				if task == _TASK_CLEAN:
					log.critical('Starting clean at %s', time.strftime(DATE_TIME_FORMAT, time.localtime( startTime )))
					executor.clean()
					log.critical('*** BUILDINFO CLEAN SUCCEEDED after %0.1f seconds', time.time()-startTime)
					return 0

				log.critical('Starting "%s" build at %s', init.getPropertyValue('TARGET_BUILD_VARIANT'),
					time.strftime(DATE_TIME_FORMAT, time.localtime( startTime )))
				errorsList = executor.build()
				if errorsList:
					log.critical('*** BUILDINFO FAILED: %d error(s): \n   %s', len(errorsList), '\n   '.join(errorsList))
					return 4

				# using *** here means we get a valid final progress message
				log.critical('*** BUILDINFO SUCCEEDED: %d module(s) built after %0.1f seconds', len(init.modules()), time.time()-startTime)
				return 0
			finally:
				logging.getLogger().removeHandler(fileHandler)
				fileHandler.close()
		else:
			raise Exception('Task type not implemented yet - '+task) # should not happen

		return 0

	except BuildException as e:
		# hopefully we don't end up here very often
		log.error('*** BUILDINFO FAILED: %s', e.toMultiLineString(None))
		return 5

	except Exception as e:
		log.exception('*** BUILDINFO FAILED: ')
		return 6

	finally:
		logging.getLogger().removeHandler(hdlr)

def _maybeCustomizeLogFilename(logFile, isClean):
	# calling buildinfo for a clean must not overwrite the main build log
	if not isClean: return logFile
	extPos = logFile.rfind('.')
	if extPos <= 0 or extPos < max(logFile.rfind('/'), logFile.rfind('\\')):
		return logFile+'-clean'
	return logFile[:extPos]+'-clean'+logFile[extPos:]

def run():
	""" Entry point for the ``buildinfo`` console script. """
	sys.exit(main(sys.argv[1:]))
