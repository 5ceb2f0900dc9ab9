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
Contains `BuildExecutor`, which generates the build actions of every registered module and then runs them.
"""

import os, shutil, time, traceback
import logging

from buildinfo.modulecontext import ModuleContext
from buildinfo.utils.buildexceptions import BuildException
from buildinfo.utils.fileutils import mkdir, deleteDir, deleteFile, openForWrite

log = logging.getLogger('executor')

INSTALLED_FILES_MANIFEST = 'installed-files.txt'
MAKE_METADATA_FILE = 'buildinfo-modules.mk'

class BuildExecutor(object):
	"""
	Runs the build phase for all modules registered in a `buildinfo.buildcontext.BuildInitializationContext`.

	Build actions are run sequentially in the order they were registered. Any install rules of modules that have not
	called ``skipInstall()`` are then performed, and finally the installed-files manifest
	(``${PRODUCT_OUT}/installed-files.txt``) and the make metadata file (``${OUTPUT_DIR}/buildinfo-modules.mk``)
	are written.

	@param init: the initialization context, once the build file has been loaded.
	@param dryRun: if True, log what would be done without changing anything on disk.
	"""

	def __init__(self, init, dryRun=False):
		self.init = init
		self.context = init.createBuildContext()
		self.dryRun = dryRun
		self.__plans = None # list of (module, ModuleContext)

	def generate(self):
		""" Generates the build actions for every module (once), returning a list of (module, ModuleContext). """
		if self.__plans is not None: return self.__plans
		plans = []
		for m in self.init.modules():
			m._resolveOptions(self.context)
			ctx = ModuleContext(m, self.context)
			log.info('Generating build actions for %s', m)
			try:
				m.generateBuildActions(ctx)
			except BuildException as e:
				raise BuildException('Failed to generate build actions for %s'%m, causedBy=True)
			log.debug('%s registered %d action(s) and %d install(s)', m, len(ctx.getActions()), len(ctx.getInstalls()))
			plans.append((m, ctx))
		self.__plans = plans
		return plans

	def getInstalls(self):
		""" Returns the install rules that will be performed, i.e. excluding those of modules that skip install. """
		return [i for (m, ctx) in self.generate() if not m.isInstallSkipped() for i in ctx.getInstalls()]

	def build(self):
		""" Runs all actions and installs.

		@return: a list of error strings, which is empty if the build succeeded.
		"""
		plans = self.generate()
		errors = []

		if not self.dryRun:
			for d in self.context.getOutputDirs():
				log.info('Creating output directory: %s', d)
				mkdir(d)

		for (m, ctx) in plans:
			options = m.options
			for action in ctx.getActions():
				if self.dryRun:
					log.critical('Dry run: would execute %s', action.describe())
					continue
				log.critical('  %s', action)
				startTime = time.time()
				try:
					action.run(options)
				except BuildException as e:
					log.error('FAILED: %s', e.toMultiLineString(m, includeStack=True))
					errors.append(e.toSingleLineString(m))
				except Exception as e:
					log.error('FAILED: %s due to an internal error: %s', m, traceback.format_exc())
					errors.append('%s : %s'%(m, e))
				else:
					log.info('Completed %s in %0.1f seconds', action, time.time()-startTime)
				if errors:
					return errors

		for i in self.getInstalls():
			if self.dryRun:
				log.critical('Dry run: would install %s to %s', i.sourcePath, i.installPath)
				continue
			log.info('Installing %s to %s', i.sourcePath, i.installPath)
			mkdir(os.path.dirname(i.installPath))
			shutil.copyfile(i.sourcePath, i.installPath)

		for (m, ctx) in plans:
			if m.isInstallSkipped():
				for i in ctx.getInstalls():
					log.info('Not installing %s as it is not installable', i.sourcePath)
					if not self.dryRun: deleteFile(i.installPath) # in case it was installed by a previous build

		if not self.dryRun:
			self._writeInstalledFilesManifest()
			self._writeMakeMetadata()
		return errors

	def _writeInstalledFilesManifest(self):
		productOut = self.context.getPropertyValue('PRODUCT_OUT')
		path = os.path.join(productOut, INSTALLED_FILES_MANIFEST)
		lines = sorted('/'+os.path.relpath(i.installPath, productOut).replace(os.sep, '/') for i in self.getInstalls())
		log.info('Writing installed files manifest: %s', path)
		mkdir(productOut)
		with openForWrite(path, 'wb') as f:
			f.write(''.join(l+'\n' for l in lines).encode('utf-8'))
		return path

	def _writeMakeMetadata(self):
		path = os.path.join(self.context.getPropertyValue('OUTPUT_DIR'), MAKE_METADATA_FILE)
		contents = ['# autogenerated by buildinfo\n']
		for (m, ctx) in self.generate():
			for entry in m.makeEntries():
				contents.append('\n')
				contents.append(entry.toMakefile(m.name))
		log.info('Writing make metadata: %s', path)
		mkdir(os.path.dirname(path))
		with openForWrite(path, 'wb') as f:
			f.write(''.join(contents).encode('utf-8'))
		return path

	def clean(self):
		""" Deletes all outputs and installed files of this build, and the registered output directories. """
		for (m, ctx) in self.generate():
			for action in ctx.getActions():
				if self.dryRun:
					log.critical('Dry run: would clean %s', action)
				else:
					action.clean()
			for i in ctx.getInstalls():
				if self.dryRun:
					log.critical('Dry run: would delete %s', i.installPath)
				else:
					deleteFile(i.installPath)
		productOut = self.context.getPropertyValue('PRODUCT_OUT')
		for d in self.context.getOutputDirs():
			if self.dryRun:
				log.critical('Dry run: would delete directory %s', d)
				continue
			log.info('Deleting output directory: %s', d)
			deleteDir(d)
		if not self.dryRun:
			deleteFile(os.path.join(productOut, INSTALLED_FILES_MANIFEST))
