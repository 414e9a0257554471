"""
Schemas module - the data contract shared by the API and the portal.

One module per entity. Each module declares the canonical read shape,
its ``...Create`` / ``...Update`` variants and the ``...Com...`` read
shapes that embed related summaries. The same classes validate requests
and type the code that consumes them.
"""

from academico.schemas.common import (
    SchemaModel, Pagination, Filter, DateRange, IdParam, StringIdParam,
    ApiResponse, PaginationMeta, PaginatedResponse, MessageResponse, ErrorDetail, ErrorResponse,
)
from academico.schemas.pessoa import Endereco, Pessoa, PessoaCreate, PessoaUpdate, PessoaResumo
from academico.schemas.aluno import (
    Aluno, AlunoCreate, AlunoCreateWithUser, AlunoUpdate, AlunoComPessoa,
)
from academico.schemas.professor import (
    Professor, ProfessorCreate, ProfessorCreateWithUser, ProfessorUpdate, ProfessorComPessoa,
)
from academico.schemas.curso import Curso, CursoCreate, CursoUpdate, CursoComDisciplinas
from academico.schemas.curriculo import Curriculo, CurriculoCreate, CurriculoUpdate
from academico.schemas.coorte import Coorte, CoorteCreate, CoorteUpdate
from academico.schemas.turno import Turno, TurnoCreate, TurnoUpdate, TurnoHorario
from academico.schemas.periodo import Periodo, PeriodoCreate, PeriodoUpdate, PeriodoComDisciplinas
from academico.schemas.disciplina import Disciplina, DisciplinaCreate, DisciplinaUpdate, DisciplinaComCurso
from academico.schemas.disciplina_periodo import (
    DisciplinaPeriodo, DisciplinaPeriodoCreate, DisciplinaPeriodoUpdate,
)
from academico.schemas.semestre import Semestre, SemestreCreate, SemestreUpdate
from academico.schemas.turma import (
    Turma, TurmaCreate, TurmaUpdate, TurmaCompleta, TurmaInscrito,
    TurmaInscricaoCreate, TurmaInscricaoBulk, TurmaInscricaoUpdate,
)
from academico.schemas.aula import (
    Aula, AulaCreate, AulaUpdate, AulaComFrequencia, AulasBatch, AulasBatchResponse,
    FrequenciaAtualizada, LancarFrequencias,
)
from academico.schemas.avaliacao import (
    Avaliacao, AvaliacaoCreate, AvaliacaoUpdate, AvaliacaoAluno, AvaliacaoAlunoCreate,
    AvaliacaoAlunoUpdate, AvaliacaoComNotas, LancarNotas, MediaAtualizada, ValidacaoPesos,
)
from academico.schemas.frequencia import (
    Frequencia, FrequenciaCreate, FrequenciaUpdate, FrequenciaCompleta, StatusFrequencia,
)
from academico.schemas.calendario import (
    Calendario, CalendarioCreate, CalendarioUpdate, Configuracao, ConfiguracaoUpdate, GradeMensal,
)
from academico.schemas.user import User, UserCreate, UserUpdate, ChangePassword, UserWithPessoa
from academico.schemas.auth import Login, JwtPayload, RefreshTokenRequest, AuthResponse, UserInfo
from academico.schemas.integracao import (
    DirectusAlunoImportItem, DirectusAlunoImport, DirectusProfessorImportItem, DirectusProfessorImport,
)
