import os
import os.path
import logging

from .sourcefile import FileDef
from .sourcefile import SourceFileDef
from .sourcefile import MARKDOWN_EXTENSIONS
from .sourcefile import HTML_EXTENSIONS

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = MARKDOWN_EXTENSIONS + HTML_EXTENSIONS


def get_files_in_dir(startPath):
    """ gets a recursive list of relative paths inside this directory """
    working = [""]
    results = []
    while len(working) > 0:
        current = working.pop(0)
        p = os.path.join(startPath, current)
        if (os.path.isfile(p)):
            results.append(current)
        if (os.path.isdir(p)):
            for de in sorted(os.scandir(p), key=lambda e: e.name):
                if de.name.startswith("."):
                    continue
                working.append(os.path.join(current, de.name))
    return results


def gather_source_files(topdir, extensions, config, raw_html=True):
    """ returns the files that will be processed, none of them rendered yet """
    lowExt = [t.lower() for t in extensions]
    results = []
    for rel in get_files_in_dir(topdir):
        ext = os.path.splitext(rel)[1].lower()
        if (ext in lowExt):
            results.append(SourceFileDef(os.path.join(topdir, rel), config,
                                         relative_path=os.path.split(rel)[0], raw_html=raw_html))
    return results


def needs_to_be_regenerated(destdir, file):
    return file.newer_than(os.path.join(destdir, file.dest_file_name()))


def build_file(source, dest, config, raw_html=True):
    """ renders a single file. Returns the HTML when dest is None """
    f = SourceFileDef(source, config, raw_html=raw_html)
    html_text = f.render()
    if dest is not None:
        f.write(dest)
        logger.info("Wrote %s", dest)
    return html_text


def build_dir(sourcedir, destdir, config, raw_html=True, force=False):
    """ renders every source file in sourcedir into destdir and copies
        everything else across. Returns the number of pages written """
    files = gather_source_files(sourcedir, SOURCE_EXTENSIONS, config, raw_html=raw_html)

    files_to_be_regenerated = [
        x for x in files if force or needs_to_be_regenerated(destdir, x)]
    print("Will generate", str(len(files_to_be_regenerated)), "files")

    for f in files_to_be_regenerated:
        f.write(os.path.join(destdir, f.dest_file_name()))

    """ copy static files """
    num_static_files = 0
    for s in get_files_in_dir(sourcedir):
        if (os.path.splitext(s)[1].lower() in SOURCE_EXTENSIONS):
            continue
        f = FileDef(os.path.join(sourcedir, s), relative_path=os.path.split(s)[0])
        if f.copy_if_required(destdir):
            num_static_files += 1
    print("Copied " + str(num_static_files) + " static files")

    return len(files_to_be_regenerated)
