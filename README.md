# measave

Read Mass Effect: Andromeda save files and inspect what they hold.

`measave` checks a save's file signature (`FBCHUNKS`, in either byte order), its version and its header checksum. It then decodes the metadata in the header: profile name, level, game version, completion percentage, total playtime, save date and so on. It can show all of this as a tree of raw values.

## Installing

```
pip install .
```

## Command line

```
measave path/to/save
```

The argument may be a local path or a `file:` URL. The command prints the file name and then a table of the save's header section. The table has three columns: key, read-only marker and raw value. Nested rows are indented.

- Without an argument it prints `Open a save file to continue...` and exits with status 0.
- `measave --version` prints the version.
- If the file cannot be opened or is not a valid save, a line `Failed to open save file: <reason>` goes to standard error and the command exits with status 1.

## Library use

```python
from measave.gamesave import load_game_save, GameSaveObject
from measave.rawdata import GameSaveRawDataModel
from measave.cli import render_raw_data

save = load_game_save("path/to/save")
print(save.header.profile_name, save.header.completion_percentage)

model = GameSaveRawDataModel()
model.set_game_save(GameSaveObject(save))
print(render_raw_data(model))
```

The modules:

- **`measave.gamesave`**
  - `read_game_save` reads a save from a `Serializer`.
  - `load_game_save` reads a save from a path.
  - `GameSave` holds the result: byte order, version, header and the raw payload bytes.
  - `GameSaveObject` wraps a `GameSave` behind a lock. Each of its attributes has a `<name>_changed` signal.
- **`measave.gamesaveheader`**
  - `GameSaveHeader` holds the decoded metadata. Values stored under unrecognised keys are kept in `unknown_values`. `total_playtime` is in milliseconds.
  - `read_header` decodes the header block.
  - `GameSaveHeaderObject` gives observable, lock-guarded access to a header.
  - `HeaderKey` lists the known keys.
- **`measave.serializer`**
  - `Serializer` reads unsigned integers, byte strings and UTF-8 text. It reads in a chosen `ByteOrder`, little-endian by default.
- **`measave.treeitem`, `measave.treemodel`, `measave.rawdata`**
  - These make up a small item-model layer: `TreeItem`, `AbstractTreeModel`, `ModelIndex`.
  - `GameSaveRawDataModel` lists every header field as a row.
  - Through `set_data`, `GameSaveRawDataModel` edits the values in memory.
- **`measave.djb2`**
  - `modified_djb_hash` computes the key hashes used in save headers.
- **`measave.julian`**
  - `from_julian_seconds` and `to_julian_seconds` convert the header's `date_time` to and from `datetime`.
- **`measave.messageservice`**
  - `MessageService` queues error messages and shows them one at a time through a presenter. By default the presenter is standard error.

A save that cannot be parsed raises `measave.serializer.SerializerError`, a `ValueError`. Its message says what went wrong.

## What it does not do

- There is no graphical interface. The command line only prints.
- Edits made through `GameSaveObject` or the raw-data model change values in memory only. Nothing writes a save file back to disk.
- The payload after the header is kept as raw bytes and is not decoded.

## Running the tests

```
pip install .[test]
pytest
```