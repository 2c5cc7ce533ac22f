from math import ceil
import os

import matplotlib
import matplotlib.pyplot as plt

from wallhtc.logfiles import COLUMNS, read_all

matplotlib.use('Agg')

YLABEL = 'heat transfer coefficient in W/(m^2 K)'


def plot(logdirectory, plotspath=None, format_ext='.jpg', dpi=250, marker=None):
    """Plot min, max and average coefficient of every patch over time.
    Returns the paths of the written plots."""
    df = read_all(logdirectory)
    # Stop if no plot data is available
    if df.empty:
        raise ValueError('No plot data available in {}'.format(logdirectory))

    if plotspath is None:
        plotspath = os.path.join(logdirectory, 'plots')
    if not os.path.exists(plotspath):
        os.makedirs(plotspath)

    plotpaths = []
    for columnname in COLUMNS:
        fig = plt.figure(1)
        ax = fig.add_subplot(111)
        legendlabels = []
        for patch, df_patch in df.groupby('patch'):
            ax.plot(df_patch['time'], df_patch[columnname], marker=marker)
            legendlabels.append(patch)

        ax.set_xlabel('time in s')
        ax.set_ylabel('{} {}'.format(columnname, YLABEL))
        ax.grid(linestyle='--', linewidth=2, axis='y')
        ax.legend(legendlabels, loc='center left', bbox_to_anchor=(1, 0.5), ncol=ceil(len(legendlabels) / 16))
        plotpath = os.path.join(plotspath, 'wallHeatTransferCoeff_' + columnname + format_ext)
        fig.savefig(plotpath, dpi=dpi, bbox_inches='tight')
        plt.clf()
        plotpaths.append(plotpath)

    return plotpaths
