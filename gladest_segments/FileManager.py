from collections import deque
from os import listdir, makedirs
from os.path import dirname, isdir, isfile, join
from pathlib import Path

from gladest_segments.helpers import normalize

SOURCE_EXTENSIONS = (".md", ".htex")


class FileManager:
    def __init__(self, in_path, out_directory):
        self.in_path = Path(in_path)
        self.out_directory = Path(out_directory)

    @property
    def in_directory(self):
        return self.in_path if self.in_path.is_dir() else self.in_path.parent

    def add_dirs_to_list(self):
        if self.in_path.is_file():
            return [self.in_path] if self.in_path.suffix.lower() in SOURCE_EXTENSIONS else []

        files = []
        stack = deque([""])

        while stack:
            path = stack.popleft()
            nu_dir = join(str(self.in_path), path)
            files_and_dirs = sorted(listdir(nu_dir))
            sep_files = [f for f in files_and_dirs if isfile(join(nu_dir, f)) and f[0] not in '.~']
            dirs = [f for f in files_and_dirs if isdir(join(nu_dir, f)) and f[0] not in '.~']

            for file in sep_files:
                if Path(file).suffix.lower() in SOURCE_EXTENSIONS:
                    files.append(self.in_path / path / file)

            for dir in reversed(dirs):
                stack.appendleft(join(path, dir))

        return files

    def output_path(self, source):
        relative = Path(source).relative_to(self.in_directory)
        parts = [normalize(part) for part in relative.with_suffix(".html").parts]
        return self.out_directory.joinpath(*parts)

    def read_raw(self, file_dir):
        try:
            with open(file_dir, "r", encoding="utf8") as f:
                return f.read()
        except UnicodeDecodeError:
            with open(file_dir, "r", encoding="latin-1") as f:
                return f.read()

    def writeToFile(self, export_file, new_file):
        makedirs(dirname(str(export_file)) or ".", exist_ok=True)

        with open(export_file, "w", encoding="utf-8") as exp_file:
            exp_file.write(new_file)
