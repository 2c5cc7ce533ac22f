import os

from PyFoam.RunDictionary.SolutionDirectory import SolutionDirectory

from wallhtc import config
from wallhtc.fields import write_field
from wallhtc.mesh import Mesh


class Case(SolutionDirectory):
    """OpenFOAM case directory the function object is evaluated in"""
    def __init__(self, name, archive=None, paraviewLink=False):
        SolutionDirectory.__init__(self, name, archive=archive, paraviewLink=paraviewLink)

    def get_times(self):
        """Get all times with timedirectories, parallel or not"""
        times = self.getTimes()
        # If case is not reconstructed self.getTimes() only returns 0 directory, use parallel times instead
        if len(times) < len(self.getParallelTimes()):
            times = self.getParallelTimes()
        return times

    def latesttime(self):
        return self.get_times()[-1]

    def select_times(self, selection=None, latest=False):
        """Select time directories by a comma separated list of times or
        ranges 'start:end' with open ends allowed"""
        times = self.getTimes()
        if latest:
            return times[-1:]
        if not selection:
            return times

        selected = []
        for item in str(selection).split(','):
            item = item.strip()
            if ':' in item:
                start, end = item.split(':', 1)
                start = float(start) if start else float('-inf')
                end = float(end) if end else float('inf')
                selected.extend(t for t in times if start <= float(t) <= end)
            else:
                selected.extend(t for t in times if float(t) == float(item))
        return sorted(set(selected), key=float)

    def region_time_dir(self, time, region=None):
        if region:
            return os.path.join(self.name, str(time), region)
        return os.path.join(self.name, str(time))

    def region_constant_dir(self, region=None):
        if region:
            return os.path.join(self.constantDir(), region)
        return self.constantDir()

    def polymesh_dir(self, time=None, region=None):
        """polyMesh of a time directory for changing meshes, else the constant one"""
        if time is not None:
            timemesh = os.path.join(self.region_time_dir(time, region), 'polyMesh')
            if os.path.exists(os.path.join(timemesh, 'faces')):
                return timemesh
        return os.path.join(self.region_constant_dir(region), 'polyMesh')

    def read_mesh(self, time=None, region=None):
        return Mesh.read(self.polymesh_dir(time, region))

    def function_dict(self, name, dictfile=None):
        """Function entry from controlDict or from a separate file in system"""
        return config.read_function_dict(self.systemDir(), name, dictfile)

    def postprocessing_dir(self, name, region=None, starttime='0'):
        """Directory for the log files of a function, one per start time"""
        path = os.path.join(self.name, 'postProcessing')
        if region:
            path = os.path.join(path, region)
        return os.path.join(path, name, str(starttime))

    def field_writer(self, registry, region=None):
        """Return a function writing fields of the registry into the current time directory"""
        def writer(field):
            timedir = self.region_time_dir(registry.time_name, region)
            if not os.path.exists(timedir):
                os.makedirs(timedir)
            write_field(field, registry.mesh, os.path.join(timedir, field.name))
        return writer
