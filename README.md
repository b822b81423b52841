# huffarc

huffarc is a small file archiver built on Huffman coding. It packs single
files or a whole directory tree into one `.mach` archive. It can also extract
them again, list what an archive holds, and check that an archive is intact.

Every file gets its own Huffman tree. Each archive entry also carries a check
sum, so a damaged archive is caught when it is listed or checked.

## Installation

```
pip install .
```

This installs the `huffarc` command. The same entry point can be run as
`python -m huffarc.cli`.

## Usage

Options are single letters and can be grouped, so `-ai` means the same as
`-a -i`. Each run takes exactly one mode option and exactly one archive path.

| Option      | Meaning                                                     |
|-------------|-------------------------------------------------------------|
| `-a`        | create an archive                                           |
| `-e`        | extract an archive                                          |
| `-l`        | list the files in an archive and their sizes                |
| `-c`        | check an archive's integrity                                |
| `-f FILE..` | files to archive (must not follow `-r`)                     |
| `-r DIR`    | archive a whole directory tree                              |
| `-d DIR`    | destination directory for extraction (only with `-e`)       |
| `-i`        | accepted and recorded, but has no effect on any mode        |

### Create an archive

```
huffarc -a backup -f notes.txt photo.png
huffarc -a project -r ./project
```

The `.mach` extension is added to the archive name, so the commands above
create `backup.mach` and `project.mach`. A progress bar is shown while files
are added, followed by a `TOTAL EXTRACTED` line with the total original size.
If archiving fails, the partly written archive is removed.

For a directory, each file is stored under a path relative to the directory's
parent, so the directory name itself is kept. For a list of files, only each
file's name is stored.

### Extract an archive

```
huffarc -e project.mach -d ./restore
```

Here the archive path is given in full, extension included. The directory
given with `-d` must already exist; without `-d`, files are extracted
relative to the current directory. Any directories the stored paths need are
created. If a file already exists, a free name such as `report(1).txt` is
used instead, so nothing is overwritten.

### List and check

```
huffarc -l project.mach
huffarc -c project.mach
```

Listing prints a table with each file's path, compressed size and original
size, followed by a `TOTAL:` row. Checking reads the whole archive, verifies
the check sum of every entry, and prints `Archive status: OK` if all of them
match. Both stop with an error at the first entry whose check sum is wrong.

If the command line is wrong, the command prints `ERROR:` and a message to
standard error; if the archive cannot be read or written, it prints the
message alone. In both cases it exits with status 1.

## Use from Python

```python
from huffarc.cli import parse_args
from huffarc.api import run_archivator

settings = parse_args(["-l", "project.mach"])
for entry in run_archivator(settings):
    print(entry.path, entry.base_size_bytes, entry.compress_size_bytes)
```

`parse_args` takes the arguments without the program name and returns a
`huffarc.types.SetupSettings`; it raises `huffarc.cli.UsageError` for a bad
command line. `run_archivator` runs the chosen mode, writes its output to the
given text stream (standard output by default), returns a list of
`huffarc.types.FileData`, and raises `huffarc.types.ArchivatorError` when an
operation fails.

The building blocks are usable on their own: `huffarc.huffman` builds trees
and code tables, `huffarc.buffers` has `BitWriter` and `BitReader`, and
`huffarc.core` stores and extracts single files in an open archive stream.

## What it does not do

- Empty directories are not stored; only files found below the directory are.
- Each file is read into memory whole while it is compressed.
- An archive cannot be updated in place: files cannot be added to or removed
  from an existing archive.