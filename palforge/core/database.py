# ==============================================================================
# DATABASE MODULE
# ==============================================================================
# SQLite history of palette generation runs. Uses SQLAlchemy ORM.
#
# Tables:
#   - generation_runs:     One row per batch (source palette, output folder,
#                          how many files were requested/written, outcome)
#   - generated_palettes:  One row per written .pal file with its MD5
#
# A run is opened before the first file is written and closed with
# finish_run(), so a batch that aborts half way still shows exactly which
# files made it to disk.
# ==============================================================================

import os
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


# Run status values
STATUS_RUNNING = 'running'
STATUS_COMPLETED = 'completed'
STATUS_FAILED = 'failed'
STATUS_CANCELLED = 'cancelled'


# ==============================================================================
# GENERATION RUN MODEL
# ==============================================================================
# Example:
#   run = GenerationRun(source_palette="body.pal", output_folder="out",
#                       kind="groups", requested=10)
# ==============================================================================
class GenerationRun(Base):
    """
    One generation batch.

    Attributes:
        id (int):              Unique identifier
        source_palette (str):  Path of the base palette
        source_md5 (str):      MD5 of the base palette bytes
        output_folder (str):   Destination folder
        kind (str):            "groups" or a single mode label
        group_count (int):     Number of color groups composed
        skin_type (int):       Skin ramp used (None for single-mode runs)
        requested (int):       Palettes the batch was expected to produce
        written (int):         Palettes actually written
        status (str):          running, completed, failed, cancelled
        error (str):           Failure message, if any
    """
    __tablename__ = 'generation_runs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_palette = Column(String(500), nullable=True)
    source_md5 = Column(String(32), nullable=True)
    output_folder = Column(String(500), nullable=False)
    kind = Column(String(50), nullable=False, default='groups')
    group_count = Column(Integer, default=0)
    skin_type = Column(Integer, nullable=True)
    requested = Column(Integer, default=0)
    written = Column(Integer, default=0)
    status = Column(String(20), default=STATUS_RUNNING)
    error = Column(Text, nullable=True)
    started_at = Column(DateTime, default=datetime.utcnow)
    finished_at = Column(DateTime, nullable=True)

    palettes = relationship("GeneratedPalette", back_populates="run",
                            cascade="all, delete-orphan")

    def __repr__(self):
        return (f"<GenerationRun(id={self.id}, kind='{self.kind}', "
                f"written={self.written}/{self.requested}, status='{self.status}')>")


# ==============================================================================
# GENERATED PALETTE MODEL
# ==============================================================================
class GeneratedPalette(Base):
    """
    A palette file written by a run.

    Attributes:
        id (int):          Unique identifier
        run_id (int):      Parent run
        variation (int):   0-based output index within the run
        file_name (str):   Name of the written file
        path (str):        Full path of the written file
        hash_md5 (str):    MD5 of the palette bytes
    """
    __tablename__ = 'generated_palettes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    run_id = Column(Integer, ForeignKey('generation_runs.id'), nullable=False)
    variation = Column(Integer, nullable=False)
    file_name = Column(String(255), nullable=False)
    path = Column(String(1000), nullable=False)
    hash_md5 = Column(String(32), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    run = relationship("GenerationRun", back_populates="palettes")

    def __repr__(self):
        return f"<GeneratedPalette(run={self.run_id}, variation={self.variation}, '{self.file_name}')>"


# ==============================================================================
# DATABASE MANAGER CLASS
# ==============================================================================
# Usage:
#   db = Database(Paths.get_database_path())
#   run = db.create_run("body.pal", "out", kind="groups", requested=10)
#   db.add_palette(run.id, 0, "out/palette_001.pal", md5)
#   db.finish_run(run.id, written=1)
# ==============================================================================
class Database:
    """
    Database manager for the generation history.

    Attributes:
        db_path (str): Path to the SQLite file, or ":memory:"
        engine: SQLAlchemy engine instance
        Session: SQLAlchemy session factory
    """

    def __init__(self, db_path: str):
        """
        Initialize the database connection.

        Args:
            db_path: Path to the SQLite database file (created if missing),
                     or ":memory:" for a throwaway database.
        """
        self.db_path = db_path

        if db_path == ':memory:':
            # One shared connection, otherwise every session sees an empty db
            self.engine = create_engine('sqlite://', echo=False,
                                        connect_args={'check_same_thread': False},
                                        poolclass=StaticPool)
        else:
            folder = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(folder, exist_ok=True)
            self.engine = create_engine(f'sqlite:///{db_path}', echo=False)

        self.Session = sessionmaker(bind=self.engine)
        Base.metadata.create_all(self.engine)

    def close(self):
        """Release the engine's connections."""
        self.engine.dispose()

    # ==========================================================================
    # RUN OPERATIONS
    # ==========================================================================

    def create_run(self, source_palette: Optional[str], output_folder: str,
                   kind: str = 'groups', requested: int = 0, group_count: int = 0,
                   skin_type: Optional[int] = None,
                   source_md5: Optional[str] = None) -> GenerationRun:
        """
        Open a new run in the running state.

        Returns:
            The created GenerationRun
        """
        session = self.Session()
        try:
            run = GenerationRun(
                source_palette=source_palette,
                source_md5=source_md5,
                output_folder=output_folder,
                kind=kind,
                requested=requested,
                group_count=group_count,
                skin_type=skin_type,
                status=STATUS_RUNNING,
            )
            session.add(run)
            session.commit()
            session.refresh(run)
            return run
        finally:
            session.close()

    def add_palette(self, run_id: int, variation: int, path: str,
                    hash_md5: str) -> GeneratedPalette:
        """Record one written palette file."""
        session = self.Session()
        try:
            palette = GeneratedPalette(
                run_id=run_id,
                variation=variation,
                file_name=os.path.basename(path),
                path=path,
                hash_md5=hash_md5,
            )
            session.add(palette)
            session.commit()
            session.refresh(palette)
            return palette
        finally:
            session.close()

    def finish_run(self, run_id: int, written: int, status: str = STATUS_COMPLETED,
                   error: Optional[str] = None) -> Optional[GenerationRun]:
        """
        Close a run with its final file count and outcome.

        Returns:
            The updated run, or None if it does not exist
        """
        session = self.Session()
        try:
            run = session.get(GenerationRun, run_id)
            if run is None:
                return None
            run.written = written
            run.status = status
            run.error = error
            run.finished_at = datetime.utcnow()
            session.commit()
            session.refresh(run)
            return run
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_run(self, run_id: int) -> Optional[GenerationRun]:
        """Get a run by id."""
        session = self.Session()
        try:
            return session.get(GenerationRun, run_id)
        finally:
            session.close()

    def get_recent_runs(self, limit: int = 10) -> List[GenerationRun]:
        """Most recent runs first."""
        session = self.Session()
        try:
            return (session.query(GenerationRun)
                    .order_by(GenerationRun.id.desc())
                    .limit(limit)
                    .all())
        finally:
            session.close()

    def get_run_palettes(self, run_id: int) -> List[GeneratedPalette]:
        """Palettes written by a run, in variation order."""
        session = self.Session()
        try:
            return (session.query(GeneratedPalette)
                    .filter(GeneratedPalette.run_id == run_id)
                    .order_by(GeneratedPalette.variation)
                    .all())
        finally:
            session.close()

    def find_by_hash(self, hash_md5: str) -> List[GeneratedPalette]:
        """Every recorded palette with the given MD5."""
        session = self.Session()
        try:
            return (session.query(GeneratedPalette)
                    .filter(GeneratedPalette.hash_md5 == hash_md5)
                    .all())
        finally:
            session.close()

    # ==========================================================================
    # STATISTICS
    # ==========================================================================

    def get_stats(self) -> dict:
        """Get overall statistics about the history."""
        session = self.Session()
        try:
            return {
                'runs': session.query(GenerationRun).count(),
                'completed_runs': session.query(GenerationRun).filter(
                    GenerationRun.status == STATUS_COMPLETED).count(),
                'failed_runs': session.query(GenerationRun).filter(
                    GenerationRun.status == STATUS_FAILED).count(),
                'palettes': session.query(GeneratedPalette).count(),
            }
        finally:
            session.close()
