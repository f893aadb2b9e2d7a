"""nexthelper -- local workflow tools for the square-gallery Next.js site.

Two independent flows live here:

* :mod:`nexthelper.scaffolder` creates a new square component and registers it
  in the router, the central square and the side-square list.
* :mod:`nexthelper.builder` runs the static export, mirrors it into the
  deployment folder and starts the file server and the dev server.
"""

__version__ = "0.1.0"
