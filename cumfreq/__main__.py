#
# Copyright (C) 2024 University of Oxford
#
# This file is part of cumfreq.
#
# cumfreq is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# cumfreq is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with cumfreq.  If not, see <http://www.gnu.org/licenses/>.
#
from cumfreq import cli

if __name__ == "__main__":
    cli.cumfreq_main()
