import csv
import os

import numpy as np
import pandas as pd

COLUMNS = ['min', 'max', 'average']


class LogFiles:
    """Time series files, one per patch, in a postProcessing directory.

    A file is created with its header the first time a row is written for it
    and appended to afterwards. After a reset the next row of a file is
    preceded by a new header, the rows already logged are kept.
    """
    def __init__(self, directory, title='Wall heat transfer coefficient', columns=COLUMNS):
        self.directory = directory
        self.title = title
        self.columns = list(columns)
        self._created = set()
        self._headers = set()

    def path(self, name):
        return os.path.join(self.directory, name + '.dat')

    def reset(self):
        """Write new headers at the next write, e.g. after the patch selection changed"""
        self._headers.clear()

    def write_row(self, name, time, values):
        if not os.path.exists(self.directory):
            os.makedirs(self.directory)

        filepath = self.path(name)
        if name not in self._created:
            with open(filepath, 'w') as f:
                self._write_header(f, name)
            self._created.add(name)
            self._headers.add(name)
        elif name not in self._headers:
            with open(filepath, 'a') as f:
                self._write_header(f, name)
            self._headers.add(name)

        with open(filepath, 'a', newline='') as f:
            writer = csv.writer(f, delimiter='\t', lineterminator='\n')
            writer.writerow([_format(time)] + [_format(value) for value in values])

    def _write_header(self, f, name):
        f.write('# {}\n'.format(self.title))
        f.write('# Patch : {}\n'.format(name))
        f.write('#\n')
        f.write('# ' + '\t'.join(['Time'] + self.columns) + '\n')


def patch_statistics(values, weights):
    """Minimum, maximum and weighted average, nan for a patch without faces"""
    if len(values) == 0:
        return np.nan, np.nan, np.nan
    sumWeights = np.sum(weights)
    if sumWeights > 0:
        average = np.sum(weights * values) / sumWeights
    else:
        average = np.mean(values)
    return np.min(values), np.max(values), average


def read(path, columns=COLUMNS):
    """Read a log file written by LogFiles into a DataFrame"""
    return pd.read_table(
        path, sep=r"\s+", comment='#', header=None, names=['time'] + list(columns)
        )


def read_all(directory, columns=COLUMNS):
    """Read all log files of a directory into one DataFrame with a patch column"""
    df_list = []
    for filename in sorted(os.listdir(directory)):
        if not filename.endswith('.dat'):
            continue
        df = read(os.path.join(directory, filename), columns)
        df.insert(1, 'patch', os.path.splitext(filename)[0])
        df_list.append(df)
    if not df_list:
        return pd.DataFrame(columns=['time', 'patch'] + list(columns))
    df = pd.concat(df_list)
    df.index = range(len(df))
    return df


def _format(value):
    return '{:.6g}'.format(value)
