# Swiss Pairing
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Bye scores (configurable per tournament)
FULL_POINT_BYE_SCORE = 1.0
HALF_POINT_BYE_SCORE = 0.5
ZERO_POINT_BYE_SCORE = 0.0
BYE_SCORE = FULL_POINT_BYE_SCORE
VALID_BYE_SCORES = (ZERO_POINT_BYE_SCORE, HALF_POINT_BYE_SCORE, FULL_POINT_BYE_SCORE)

# Result notation written back to the store
RESULT_WHITE_WIN = "1-0"
RESULT_DRAW = "1/2-1/2"
RESULT_BLACK_WIN = "0-1"
RESULT_WHITE_FORFEIT_WIN = "1-0 FF"  # White wins by forfeit (black didn't show)
RESULT_BLACK_FORFEIT_WIN = "0-1 FF"  # Black wins by forfeit (white didn't show)
RESULT_DOUBLE_FORFEIT = "0-0 FF"  # Both players forfeited
RESULT_ONGOING = "*"

# Tournament bounds
MIN_NUM_ROUNDS = 2
MAX_NUM_ROUNDS = 30
MIN_ACTIVE_PLAYERS = 2
MAX_RATING = 3500

# Time categories select which rating a registration snapshot is taken from
TIME_STANDARD = "standard"
TIME_RAPID = "rapid"
TIME_BLITZ = "blitz"
TIME_CATEGORIES = (TIME_STANDARD, TIME_RAPID, TIME_BLITZ)

# Colour streak length a player must not exceed
MAX_COLOR_STREAK = 2

# Search bounds for the pairing generator
DEFAULT_MAX_FLOATER_OPTIONS = 64
DEFAULT_MAX_EXCHANGE_NODES = 5000
DEFAULT_MAX_BACKTRACK_STEPS = 20000

# Float comparisons are done on exact half points
SCORE_EPSILON = 1e-9
