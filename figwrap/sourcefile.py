import os
import os.path
import shutil

import lxml.etree

from . import render
from .errors import CompileError

MARKDOWN_EXTENSIONS = [".md", ".markdown"]
HTML_EXTENSIONS = [".html", ".htm"]


class FileDef:
    """ A file on disk, its modification time and (once read) contents """
    def __init__(self, file_name, relative_path=""):
        self.file_name = file_name
        self.relative_path = relative_path
        self.contents = None
        self.mod_time = 0
        if os.path.exists(file_name):
            self.mod_time = os.path.getmtime(file_name)

    def read_contents(self):
        if self.contents is None:
            with open(self.file_name, encoding="utf-8") as f:
                self.contents = f.read()
        return self.contents

    def newer_than(self, path):
        """ True when path is missing or older than this file """
        if not os.path.exists(path):
            return True
        return os.path.getmtime(path) < self.mod_time

    def copy_if_required(self, dest_dir):
        """ copies the file into dest_dir (under relative_path) unless the
            copy there is up to date """
        dest_file = os.path.join(dest_dir, self.relative_path, os.path.basename(self.file_name))
        if not self.newer_than(dest_file):
            return False
        os.makedirs(os.path.dirname(dest_file), exist_ok=True)
        shutil.copy2(self.file_name, dest_file)
        return True


class SourceFileDef(FileDef):
    """ A markdown or HTML file whose images get wrapped in figures.
        Nothing is read until render() is called. """
    def __init__(self, file_name, config, relative_path="", raw_html=True):
        super().__init__(file_name, relative_path)
        self.config = config
        self.raw_html = raw_html
        self.processed_text = None

    def extension(self):
        return os.path.splitext(self.file_name)[1].lower()

    def is_markdown(self):
        return self.extension() in MARKDOWN_EXTENSIONS

    def dest_file_name(self):
        """ output path relative to the destination directory """
        base = os.path.splitext(os.path.basename(self.file_name))[0]
        return os.path.join(self.relative_path, base + ".html")

    def render(self):
        if self.processed_text is not None:
            return self.processed_text
        try:
            contents = self.read_contents()
            if self.is_markdown():
                self.processed_text = render.render_markdown(contents, self.config, raw_html=self.raw_html)
            else:
                self.processed_text = render.render_html(contents, self.config)
        except (OSError, ValueError, lxml.etree.LxmlError) as err:
            raise CompileError(str(err), self.file_name)
        return self.processed_text

    def write(self, dest_file_path):
        text = self.render()
        os.makedirs(os.path.dirname(os.path.abspath(dest_file_path)), exist_ok=True)
        with open(dest_file_path, "w", encoding="utf-8") as f:
            f.write(text)
