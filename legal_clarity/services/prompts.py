"""Prompt templates for the hosted model, keyed by PromptName"""
from typing import Dict, NamedTuple

from ..models import PromptName


class PromptTemplate(NamedTuple):
    system: str
    template: str


LEGAL_ASSISTANT_SYSTEM = """You are an expert legal assistant. Your responses should be:
- Accurate and grounded in the document you are given
- Clear and accessible to laypersons
- Explicit about legal compliance problems, citing the relevant law where possible
Always answer with a single JSON object and nothing else."""

PROMPTS: Dict[PromptName, PromptTemplate] = {
    PromptName.FULL_DOCUMENT_ANALYSIS: PromptTemplate(
        system=LEGAL_ASSISTANT_SYSTEM,
        template="""Analyze the following legal document and provide:
1. summary: A concise summary of the document.
2. riskAssessment: A general overview of the potential risks.
3. keyClauses: Explanations of the most important clauses.
4. complianceAnalysis: A detailed compliance analysis. If the document or any of its clauses are potentially illegal or non-compliant, name the laws, regulations or legal principles being violated and explain the potential legal consequences (fines, unenforceability).

Tailor the response to the document type and analysis mode.

Document Type: {document_type}
Analysis Mode: {analysis_mode}

Document Text:
{document_text}
""",
    ),
    PromptName.CLAUSE_RISK_ASSESSMENT: PromptTemplate(
        system=LEGAL_ASSISTANT_SYSTEM,
        template="""Assess the following legal document clause by clause. For each clause that may put the user at a significant disadvantage, contains excessive obligations, or is potentially illegal, add an entry to "risks" with:
- clause: the exact clause text
- riskLevel: Low, Medium or High
- explanation: why the clause is risky
- complianceIssues: the law, regulation or principle the clause violates and the potential consequences, or 'None'

Leave clauses without risk out of the list.

Document:
{document_text}
""",
    ),
    PromptName.QUESTION_ANSWERING: PromptTemplate(
        system=LEGAL_ASSISTANT_SYSTEM,
        template="""Answer the question about the document below. If the question touches on the legality or compliance of a clause, cite the relevant laws, sections or legal principles and explain the potential consequences.

Document:
{document_text}

{conversation}

Question:
{question}
""",
    ),
    PromptName.TEXT_SIMPLIFICATION: PromptTemplate(
        system=LEGAL_ASSISTANT_SYSTEM,
        template="""Simplify the following legal text so that an average person can understand it, without changing its meaning.

If a clause appears illegal, non-compliant or unusually harsh, add a bold warning (e.g. **WARNING: This clause may be legally unenforceable...**) in the simplified explanation of that section, stating the issue briefly.

Legal Text:
{legal_text}
""",
    ),
    PromptName.DOCUMENT_COMPARISON: PromptTemplate(
        system=LEGAL_ASSISTANT_SYSTEM,
        template="""Compare the two legal documents below. Cover, with a heading for each:
1. Key Similarities
2. Significant Differences
3. Potential Conflicts
4. Overall Assessment

Document 1:
{document_1}

---

Document 2:
{document_2}
""",
    ),
    PromptName.CLAUSE_AMENDMENT: PromptTemplate(
        system=LEGAL_ASSISTANT_SYSTEM,
        template="""Rewrite the risky clause below so it is fair, balanced and legally compliant for the user, and explain how the new wording mitigates the risk and improves compliance. Keep a professional tone.

Original Clause:
"{original_clause}"

Identified Risk/Illegality:
"{risk_explanation}"
""",
    ),
    PromptName.OCR: PromptTemplate(
        system="You are an Optical Character Recognition (OCR) expert. Always answer with a single JSON object and nothing else.",
        template="Extract all text from the attached document image. Keep the original formatting as much as possible.",
    ),
}


def render_prompt(name: PromptName, **inputs) -> PromptTemplate:
    """Fill a template; returns the system prompt and the rendered user prompt."""
    prompt = PROMPTS[PromptName(name)]
    return PromptTemplate(system=prompt.system, template=prompt.template.format(**inputs))
